#!/usr/bin/env python
# -*- coding: UTF-8 -*-
import dataclasses
import inspect
import pathlib
import typing

from setuptools import find_packages, setup


@dataclasses.dataclass
class About:
    title: str = None
    package: str = None
    description: str = None
    version: str = None
    author: str = None
    license: str = None
    copyright: str = None

    @classmethod
    def from_dict(cls, dikt: typing.Mapping) -> "About":
        dikt = dict(zip((x.strip("__") for x in dikt.keys()), dikt.values()))
        sig = inspect.signature(cls)
        return cls(
            **sig.bind(
                **{x: y for x, y in dikt.items() if x in sig.parameters}
            ).arguments
        )

    @classmethod
    def from_path(cls, path: pathlib.Path) -> "About":
        about = {}
        exec(path.resolve().read_text(), about)
        return cls.from_dict(about)


HOME = pathlib.Path(__file__).resolve().parent
LIB = HOME / "typedesc"
ABOUT = About.from_path(LIB / "__about__.py")
README = (HOME / "README.md").read_text()
INSTALL_REQUIRES = ("inflection", "typing-extensions>=4.8")
TESTS_REQUIRE = ("pytest", "pytest-parametrize-suite")


setup(
    name=ABOUT.title,
    version=ABOUT.version,
    packages=find_packages(exclude=("tests", "tests.*")),
    license=ABOUT.license,
    author=ABOUT.author,
    description=ABOUT.description,
    long_description=README,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Natural Language :: English",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Software Development :: Code Generators",
        "Topic :: Utilities",
        "Typing :: Typed",
    ],
    python_requires=">=3.10",
    install_requires=INSTALL_REQUIRES,
    extras_require={"tests": TESTS_REQUIRE},
    package_data={ABOUT.package: ["py.typed"]},
)

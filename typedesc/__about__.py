__title__ = "typedesc"
__package__ = "typedesc"
__description__ = "Typedesc: Describe Python types for JSON Schema."
__version__ = "0.4.0"
__author__ = "typedesc contributors"
__license__ = "MIT"
__copyright__ = "Copyright 2026 typedesc contributors"


__all__ = (
    "__title__",
    "__package__",
    "__description__",
    "__version__",
    "__author__",
    "__license__",
    "__copyright__",
)

# flake8: noqa
from .__about__ import __version__
from .api import *

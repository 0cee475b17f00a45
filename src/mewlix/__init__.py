"""
Mewlix runtime core

The runtime values, relations, serialization and module namespace that
compiled Mewlix programs link against.
"""

__version__ = "0.1.0"


from ._error import *
from ._reflect import *
from ._relation import *
from ._shelf import *
from ._box import *
from ._clowder import *
from ._cattree import *
from ._purrify import *
from ._json import *
from ._namespace import *
from ._ops import *
from ._std import *
from ._runtime import *
from ._config import *

"""Cache core domain: entities, value objects, events, exceptions, protocols."""

from .entities import *
from .value_objects import *
from .events import *
from .exceptions import *
from .protocols import *

from .core import *
from .eop import *
from .standards import *
from .results import *
from .location import *
from .utils import *
from .configs import *
from .logging import set_log_level

__version__ = "0.1.0"

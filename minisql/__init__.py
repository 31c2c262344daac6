# __init__.py
from .storage import TableStore
from .table import TableImage
from .engine import CommandEngine
from .parser import parse_statement
from .cli import MiniSQLShell
from .errors import MiniSQLError

__version__ = "0.1.0"

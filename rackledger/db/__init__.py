# Importing the package registers every model on Base.metadata.
from . import database  # noqa: F401

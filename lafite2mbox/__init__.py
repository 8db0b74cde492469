"""
lafite2mbox - Convert Laurel/Lafite mail files to mbox.
"""

__version__ = "1.0.0"

from .services import FileConverter, MessageConverter

__all__ = ["FileConverter", "MessageConverter", "__version__"]

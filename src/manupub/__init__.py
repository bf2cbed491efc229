"""manupub: Markdown manuscript pipeline"""

__version__ = "0.1.0"

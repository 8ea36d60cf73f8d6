"""Love Calculator - what does fate say about your love?"""

__version__ = "0.1.0"

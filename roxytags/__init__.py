"""roxytags: custom roxygen tags for R package documentation.

Provides ``@examplesTempdir``, which runs examples inside a scratch
directory, and ``@examplesWebR``, which adds a shareable webR REPL link
or embedded frame next to the regular examples section.
"""

__version__ = "0.1.0"

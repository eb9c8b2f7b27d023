"""Package entry point for ``python -m plato_converter``.

WHY: Users run the converter as
``python -m plato_converter document-to-text transcript.html``.
Python's ``-m`` flag looks for ``__main__.py`` inside the package and
executes it.

HOW: Delegates to the CLI's main() function.
"""

from plato_converter.cli import main

if __name__ == "__main__":
    main()

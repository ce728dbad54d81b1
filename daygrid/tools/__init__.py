"""daygrid.tools package

Developer utilities run as `python -m daygrid.tools.<name>`.

Keep this package's __init__ free of eager imports so module execution has no
import-time side effects.
"""

__all__: list[str] = []

# apps/core/presentation/rendering.py
import io
import shutil

from rich.console import Console


def render_to_text(renderable, color: bool = False, width: int = None) -> str:
    """Renderuje obiekt rich do tekstu, który komenda zapisuje przez self.stdout."""
    width = width or shutil.get_terminal_size((120, 24)).columns
    console = Console(
        file=io.StringIO(),
        width=width,
        force_terminal=color,
        no_color=not color,
        highlight=False,
    )
    console.print(renderable)
    return console.file.getvalue()

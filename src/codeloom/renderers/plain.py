"""Plain renderer - a Document's generated text, nothing else."""

from codeloom.renderers.base import LineRenderer


class PlainRenderer(LineRenderer[str]):
    """Renders a Document to plain text. Provenance markers are ignored."""

    def _begin(self) -> None:
        self._chunks: list[str] = []
        super()._begin()

    def _reset_line(self, base_column: int) -> None:
        self._line: list[str] = [" " * base_column]

    def _line_text(self) -> str:
        return "".join(self._line)

    def _write_text(self, text: str) -> None:
        self._line.append(text)

    def _write_line(self) -> None:
        self._chunks.extend(self._line)

    def _write_newlines(self, count: int) -> None:
        self._chunks.append("\n" * count)

    def _finish(self) -> str:
        return "".join(self._chunks)

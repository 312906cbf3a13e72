"""TSDoc comment rendering for schema descriptions."""


def doc_comment(text: str | None, indent: str = "") -> list[str]:
    """Render a description as a ``/** ... */`` block, one line per source line.

    The text is kept as written; only a closing ``*/`` is escaped so it
    cannot end the comment early.
    """
    if not text:
        return []
    lines = [f"{indent}/**"]
    for line in text.replace("*/", "*\\/").splitlines():
        lines.append(f"{indent} * {line}" if line else f"{indent} *")
    lines.append(f"{indent} */")
    return lines

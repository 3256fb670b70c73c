"""Documentation text: key comments and wiki links for hover contents."""

from __future__ import annotations

WIKI_URL = "https://git.lumine.io/mythiccraft/MythicMobs/-/wikis"


def parse_documentation(comment: str) -> str:
    """Turn a block of ``#`` comment lines into documentation text.

    Only the trailing run of comment lines counts; any other line resets it.
    """
    lines: list[str] = []
    for line in comment.split("\n"):
        line = line.strip()
        if line.startswith("#"):
            lines.append(line[1:].removeprefix(" "))
        else:
            lines = []
    return "\n".join(lines)


def md_link_wiki(path: str) -> str:
    return f"[Wiki: {path.replace('-', ' ')}]({WIKI_URL}/{path})"


def md_see_also(*paths: str) -> str:
    links = "\n\n".join(f"* {md_link_wiki(path)}" for path in paths)
    return f"\n\n## See Also\n\n{links}"

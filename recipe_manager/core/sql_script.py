import re
from typing import List

COMMENT_MARKER = "-- "


def remove_comments(content: str) -> str:
    """
    Strips single-line comments: everything from "-- " through the end of the
    line, newline included. A comment on the last line runs to the end of the content.
    Block comments are not recognized.
    """
    comment_pos = content.find(COMMENT_MARKER)
    while comment_pos != -1:
        eol_pos = content.find("\n", comment_pos + 1)
        if eol_pos == -1:
            content = content[:comment_pos]
        else:
            content = content[:comment_pos] + content[eol_pos + 1:]
        comment_pos = content.find(COMMENT_MARKER, comment_pos)
    return content


def collapse_whitespace(content: str) -> str:
    return re.sub(r"\s+", " ", content)


def split_statements(content: str) -> List[str]:
    """
    Splits on every semicolon. Semicolons inside string literals are not
    special-cased, so the scripts must not contain any.
    """
    statements = []
    while content:
        semicolon = content.find(";")
        if semicolon == -1:
            # Trailing fragment without a terminator
            if content.strip():
                statements.append(content.strip())
            content = ""
        else:
            statements.append(content[:semicolon].strip())
            content = content[semicolon + 1:]
    return statements


def convert_content_to_sql_statements(content: str) -> List[str]:
    content = remove_comments(content)
    content = collapse_whitespace(content)
    return split_statements(content)

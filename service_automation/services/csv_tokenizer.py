"""
CSV tokenizer — turns a published sheet's CSV export into header-keyed rows.

Quote handling is deliberately minimal: every double quote toggles the
"inside quotes" state and is dropped from the output, so ``""`` is two
toggles rather than an escaped quote.
"""
from ..errors import MalformedInput


def split_csv_line(line):
    """Split one line on commas that sit outside double quotes."""
    fields = []
    current = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == ',' and not in_quotes:
            fields.append(''.join(current).strip())
            current = []
        else:
            current.append(char)
    fields.append(''.join(current).strip())
    return fields


def parse_csv(text):
    """
    Parse CSV text into a list of dicts keyed by the header row.

    Blank lines are skipped. Short rows are padded with empty strings,
    extra trailing fields are dropped. Raises MalformedInput only when the
    header line is empty.
    """
    lines = (text or '').splitlines()
    if not lines or not lines[0].strip():
        raise MalformedInput("CSV header line is empty")

    headers = split_csv_line(lines[0])
    rows = []
    for line in lines[1:]:
        if not line.strip():
            continue
        values = split_csv_line(line)
        rows.append({
            header: values[i] if i < len(values) else ''
            for i, header in enumerate(headers)
        })
    return rows

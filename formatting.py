from typing import List, Sequence

from models import ResultTable

NO_RESULTS = "No results found."
NO_ROWS = "Table returned no rows.\n"


def _cell_text(value) -> str:
    return "NULL" if value is None else str(value)


def _column_widths(table: ResultTable) -> List[int]:
    widths = [len(column.name) for column in table.columns]
    for row in table.rows:
        for i, value in enumerate(row):
            widths[i] = max(widths[i], len(_cell_text(value)))
    return widths


def _line(cells: Sequence[str], widths: Sequence[int]) -> str:
    return "| " + "".join(cell.ljust(width) + " | " for cell, width in zip(cells, widths))


def format_results(tables: Sequence[ResultTable]) -> str:
    """
    Render query result tables as fixed width text, one block per table.
    """
    if not tables:
        return NO_RESULTS

    output = []
    for table in tables:
        if not table.rows:
            output.append(NO_ROWS)
            continue

        widths = _column_widths(table)
        output.append(_line([column.name for column in table.columns], widths) + "\n")
        output.append(_line(["-" * width for width in widths], widths) + "\n")
        for row in table.rows:
            output.append(_line([_cell_text(value) for value in row], widths) + "\n")
        output.append(f"\n({len(table.rows)} rows)\n\n")

    return "".join(output)

"""
Griglia mensile → DataFrame e Styler (HTML) per Streamlit.

Una tabella con le etichette dei giorni (colonne = giorni della settimana) e
una tabella parallela con il CSS di sfondo per ogni casella, da usare con
DataFrame.style.apply(..., axis=None).
"""

import pandas as pd

from config import MONTH_NAMES, TILE_COLORS
from core.calendar_grid import MonthGrid, TileKind


def grid_labels_df(grid: MonthGrid) -> pd.DataFrame:
    rows = [[tile.label for tile in week] for week in grid.weeks]
    return pd.DataFrame(rows, columns=grid.header)


def grid_styles_df(grid: MonthGrid) -> pd.DataFrame:
    rows = [
        [f"background-color: {TILE_COLORS[tile.kind.value]}" for tile in week]
        for week in grid.weeks
    ]
    return pd.DataFrame(rows, columns=grid.header)


def grid_title(grid: MonthGrid, with_year: bool = False) -> str:
    title = MONTH_NAMES[grid.month].capitalize()
    return f"{title} {grid.year}" if with_year else title


def header_styles() -> list:
    """Stile della riga con i giorni della settimana (caselle HEADER)."""
    return [{
        "selector": "th.col_heading",
        "props": [("background-color", TILE_COLORS[TileKind.HEADER.value])],
    }]


def styled_grid(grid: MonthGrid):
    """Styler della griglia: intestazione HEADER, caselle colorate per tipo, senza indice."""
    labels = grid_labels_df(grid)
    styles = grid_styles_df(grid)
    return (
        labels.style
        .apply(lambda _: styles, axis=None)
        .set_table_styles(header_styles())
        .hide(axis="index")
    )

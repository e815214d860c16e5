"""Editor state: grids, styles, cursor, windows, draw commands and the editor."""
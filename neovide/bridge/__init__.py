"""Redraw event decoding, clipboard formatting and the Neovim launch command."""
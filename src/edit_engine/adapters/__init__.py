"""Host adapters that connect the editing core to a terminal UI."""

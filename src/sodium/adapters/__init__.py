"""Host adapters that put the editor on a real terminal."""

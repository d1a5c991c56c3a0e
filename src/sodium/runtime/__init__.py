"""Runtime services shared by the editor."""

"""Runtime services shared by the editing commands."""

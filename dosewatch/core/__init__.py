"""Pure computation packages: no database, no I/O, no module state."""

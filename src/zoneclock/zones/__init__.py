"""Zone catalog, identifier codec, and the region/subzone selection state machine."""

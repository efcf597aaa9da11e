"""Account credential store."""

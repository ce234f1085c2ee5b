"""BusLink bus-ticket booking backend."""

"""Host adapters embedding the engine in UI toolkits."""

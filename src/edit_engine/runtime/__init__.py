"""Runtime services (logging, profiling) shared across the engine."""

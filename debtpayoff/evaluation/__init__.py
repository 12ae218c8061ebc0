"""Strategy comparison, KPIs and reporting on top of the engine."""

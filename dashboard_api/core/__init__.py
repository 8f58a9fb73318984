"""Core module - Pipeline de normalización y alineación de series.

Estructura:
- domain/      → Modelos de dominio (mensaje, registro plano, series, snapshot)
- validators   → Validación pydantic del sobre y de las lecturas
- flattener    → Mensaje de broker → FlatRecord
- broker_index → Partición por broker
- series_builder → Series alineadas por sensor
- monitoring/  → Estadísticas de fetch
"""

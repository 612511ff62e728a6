"""
ScoreSaber PP Re-ranking - Core Package

This package contains the core modules for:
- ScoreSaber data ingestion (src.ingestion)
- PP recomputation and re-ranking (src.pp)
- Shared configuration and utilities
"""

"""Build services: target resolution, release layout, steps and orchestration."""

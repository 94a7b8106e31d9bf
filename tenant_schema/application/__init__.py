"""Application layer: DTOs, store ports, and cleanup/audit services."""

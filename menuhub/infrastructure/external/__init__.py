"""External services: tenant image storage and machine translation."""

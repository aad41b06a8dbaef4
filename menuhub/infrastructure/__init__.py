"""Infrastructure: Supabase access, Redis cache, and external HTTP services."""

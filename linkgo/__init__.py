"""LinkGo client: Supabase-backed facade for auth, profiles, catalog and bookings"""

__version__ = "1.0.0"

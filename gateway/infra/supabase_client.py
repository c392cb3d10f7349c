from supabase import create_client, Client, ClientOptions
from gateway.config import SUPABASE_URL, SUPABASE_SERVICE_KEY, SUPABASE_TIMEOUT_SECONDS


def create_service_supabase() -> Client:
    """
    Client Supabase service-role (bypass RLS) pour les écritures côté serveur.
    Construit une seule fois par le lifespan puis partagé; le timeout PostgREST borne chaque requête.
    """
    if not SUPABASE_URL or not SUPABASE_SERVICE_KEY:
        raise RuntimeError("SUPABASE_URL/SUPABASE_SERVICE_KEY manquants pour create_service_supabase()")
    options = ClientOptions(postgrest_client_timeout=SUPABASE_TIMEOUT_SECONDS)
    return create_client(SUPABASE_URL, SUPABASE_SERVICE_KEY, options=options)

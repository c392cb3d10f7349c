"""Passerelle de paiement Zoestore (Paystack + Supabase)."""

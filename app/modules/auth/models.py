# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration and login (done by the mobile/web client directly)
# - JWT token generation and validation
# - Admin deletion of auth users (see accounts module)

"""
Supabase Auth provides:
- auth.get_user(jwt) - Resolve the caller from the bearer token
- auth.admin.delete_user(id) - Remove an auth user (service role only)

Profile data for the social features lives in the public.profiles table.
"""

# No Supabase tables: AI results are returned to the client, which stores what it needs
# (e.g. restaurants.cuisine, restaurants.michelin_stars) through its own Supabase session.

CUISINE_TYPES = [
    "Italian", "Chinese", "Japanese", "Sushi", "Mexican", "French", "Indian", "Thai",
    "Mediterranean", "Greek", "Korean", "Vietnamese", "Spanish", "Turkish", "Lebanese",
    "Steakhouse", "Seafood", "American", "Pizza", "BBQ", "Bakery", "Cafe", "Deli",
    "Vegetarian", "Fusion", "Middle Eastern", "Latin American", "Contemporary", "Fine Dining",
]

FALLBACK_CUISINE = "American"

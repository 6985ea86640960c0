# No Supabase tables: inquiries are delivered by Resend and not persisted.

"""
Two emails are sent per hotel inquiry:
- to the hotel: "Hotel Inquiry: <subject>", reply-to set to the customer
- to the customer: "Confirmation: Your message to <hotel name>"
"""

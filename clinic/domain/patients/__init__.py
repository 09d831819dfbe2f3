"""Patient domain - Sign-up, profile and appointment history"""

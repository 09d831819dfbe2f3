"""Reports domain - Read-only aggregate queries for admins"""

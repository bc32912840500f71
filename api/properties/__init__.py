"""
Property data feature: row CRUD and runtime column management for the
`property_data` table.
"""

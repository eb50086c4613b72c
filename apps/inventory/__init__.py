"""
Inventory app: the product catalog and the inventory store used by sales.
"""

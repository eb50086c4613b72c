"""
Sales app: sale commitment and the transaction ledger.
"""

"""Application layer (use cases)"""

"""Infrastructure layer (storage adapters)"""

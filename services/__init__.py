"""
Service layer - business logic for image transforms
"""

"""Validation utilities - Input validation"""
from .input_validator import InputValidator

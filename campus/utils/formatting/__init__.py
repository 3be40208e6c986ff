"""Formatting utilities - JSON serialization of Mongo documents"""
from .json_utils import serialize_objectid, sanitize_mongo_document, order_by_ids

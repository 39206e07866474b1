"""Merchant self-service portal - shared modules"""

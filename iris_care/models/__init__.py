"""Data models for iris care"""

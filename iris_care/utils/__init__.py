"""Utilities for iris care"""

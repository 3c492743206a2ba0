"""Multiformats helpers."""

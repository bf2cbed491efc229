"""Manuscript pipeline stages: discover, order, derive, link, export"""

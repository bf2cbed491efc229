"""Typer command-line interface"""

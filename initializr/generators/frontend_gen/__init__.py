"""Vite and Angular frontend generation."""

"""Scaffolding engine: layout, rendering and packaging of generated projects."""

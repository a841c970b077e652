"""Outer surfaces: FastAPI JSON API and Streamlit playground."""

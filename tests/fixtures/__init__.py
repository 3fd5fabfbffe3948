"""Shared test data for Ginny tests."""

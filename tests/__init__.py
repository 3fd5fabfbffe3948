"""Test suite for Ginny."""

"""VoiceDesk Test Suite

This package contains all tests for the VoiceDesk voice command pipeline.
"""

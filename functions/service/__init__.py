"""
FastAPI service exposing the MindGains functions under one prefix.
"""

"""
Pydantic schemas for provisioning API envelopes and server data.
"""

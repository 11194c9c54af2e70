"""
Currency identities, canonical encoding and SDK configuration.
"""

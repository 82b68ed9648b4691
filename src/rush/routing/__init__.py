"""Routing: segment trie with deterministic exact > parameter > wildcard matching.

Routes are inserted during setup; once serving starts the trie is
read-only and shared by every request.
"""

"""Snapshot backup agent for ZFS volumes."""

"""Shared configuration, paths, quote store and request guards."""

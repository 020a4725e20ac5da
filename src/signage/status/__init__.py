"""TV heartbeat tracking and ONLINE/OFFLINE derivation."""

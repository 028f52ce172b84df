"""Traffic Ops API server: delivery service request comments."""

"""Combined-cycle thermal plant simulation with waste-heat reuse."""

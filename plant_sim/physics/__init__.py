"""Combined-cycle plant physics models.

Modules:
    ambient: Dry-bulb / wet-bulb / humidity random walk
    turbines: Per-turbine telemetry, status transitions and maintenance scores
    thermal_power: Net power output, efficiency and ISO-temperature deration
    fuel: Fuel flow from power and efficiency, flex-fuel blend display
    emissions: Pollutant random walk and multi-day forecast
    waste_heat: Waste heat -> absorption chiller -> cooling distribution
    resources: Resource consumption rates and storage depletion
    financials: Revenue, cost and carbon-credit economics
    data_center: Data-center IT load, PUE and cooling load
"""

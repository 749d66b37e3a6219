"""timpris: scrape Swedish hourly spot prices into InfluxDB and SQL."""

__version__ = "0.1.0"

# Request / response schemas

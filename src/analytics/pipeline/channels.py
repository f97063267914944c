"""Names of the output channels the pipeline publishes to."""

WAREHOUSE_STOCK = "warehouse-stock"
WAREHOUSE_CAPACITY = "warehouse-capacity"
GLOBAL_STOCK = "global-stock"
GLOBAL_STOCK_PERCENTAGE = "global-stock-percentage"
DEAD_LETTER = "dead-letter"
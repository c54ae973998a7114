"""Source column names of the DataCo supply-chain export."""

ORDER_DATE = "Order Date (DateOrders)"
ORDER_ID = "Order Id"
CUSTOMER_ID = "Customer Id"
SALES = "Sales"
BENEFIT = "Benefit per order"
CATEGORY = "Category Name"
MARKET = "Market"
DELIVERY_STATUS = "Delivery Status"
SHIPPING_MODE = "Shipping Mode"
DAYS_REAL = "Days for shipping (real)"
DAYS_SCHEDULED = "Days for shipment (scheduled)"
PROFIT_RATIO = "Order Item Profit Ratio"
PRODUCT_PRICE = "Product Price"
ITEM_DISCOUNT = "Order Item Discount"
ITEM_QUANTITY = "Order Item Quantity"

# Column groups required by each analysis block
SALES_COLS = [ORDER_DATE, ORDER_ID, SALES, BENEFIT]
DELIVERY_COLS = [MARKET, SHIPPING_MODE, DELIVERY_STATUS, DAYS_REAL, DAYS_SCHEDULED]
RFM_COLS = [CUSTOMER_ID, ORDER_ID, ORDER_DATE, SALES]
TTEST_COLS = [CUSTOMER_ID, DELIVERY_STATUS, SALES]
REGRESSION_COLS = [
    PROFIT_RATIO, PRODUCT_PRICE, ITEM_DISCOUNT, ITEM_QUANTITY, CATEGORY, MARKET,
]

ALL_COLS = list(dict.fromkeys(
    SALES_COLS + [CATEGORY] + DELIVERY_COLS + RFM_COLS + TTEST_COLS + REGRESSION_COLS
))

import os
import shutil
import tempfile

import pandas as pd

from dataco_analysis.data_processing.columns import (
    BENEFIT, CATEGORY, CUSTOMER_ID, DAYS_REAL, DAYS_SCHEDULED, DELIVERY_STATUS,
    ITEM_DISCOUNT, ITEM_QUANTITY, MARKET, ORDER_DATE, ORDER_ID, PRODUCT_PRICE,
    PROFIT_RATIO, SALES, SHIPPING_MODE,
)


def make_rows(rows, **defaults):
    """DataFrame from dicts, filling every source column with a neutral default."""
    base = {
        ORDER_DATE: "1/1/2017 0:00",
        ORDER_ID: 1,
        CUSTOMER_ID: 1,
        SALES: 0.0,
        BENEFIT: 0.0,
        CATEGORY: "Fishing",
        MARKET: "Europe",
        DELIVERY_STATUS: "Shipping on time",
        SHIPPING_MODE: "Standard Class",
        DAYS_REAL: 4,
        DAYS_SCHEDULED: 4,
        PROFIT_RATIO: 0.1,
        PRODUCT_PRICE: 100.0,
        ITEM_DISCOUNT: 10.0,
        ITEM_QUANTITY: 1,
    }
    base.update(defaults)
    return pd.DataFrame([{**base, **r} for r in rows])


def make_orders_frame():
    """Small order-item table touching every analysis block."""
    return make_rows([
        {ORDER_DATE: "9/3/2017 10:15", ORDER_ID: 1, CUSTOMER_ID: 1, SALES: 120.0, BENEFIT: 20.0,
         CATEGORY: "Fishing", MARKET: "LATAM", DELIVERY_STATUS: "Late delivery", DAYS_REAL: 6, DAYS_SCHEDULED: 4},
        {ORDER_DATE: "9/20/2017 8:00", ORDER_ID: 2, CUSTOMER_ID: 2, SALES: 80.0, BENEFIT: -5.0,
         CATEGORY: "Cleats", MARKET: "Europe"},
        {ORDER_DATE: "10/2/2017 14:30", ORDER_ID: 3, CUSTOMER_ID: 3, SALES: 200.0, BENEFIT: 30.0,
         CATEGORY: "Camping & Hiking", MARKET: "USCA", DELIVERY_STATUS: "Advance shipping", DAYS_REAL: 2},
        {ORDER_DATE: "10/18/2017 9:05", ORDER_ID: 4, CUSTOMER_ID: 4, SALES: 60.0, BENEFIT: 6.0,
         CATEGORY: "Cardio Equipment", MARKET: "Africa", DELIVERY_STATUS: "Shipping canceled", DAYS_REAL: 5, DAYS_SCHEDULED: 2},
        {ORDER_DATE: "11/5/2017 11:00", ORDER_ID: 5, CUSTOMER_ID: 1, SALES: 40.0, BENEFIT: 4.0,
         CATEGORY: "Fishing", MARKET: "LATAM", PRODUCT_PRICE: 40.0, ITEM_DISCOUNT: 4.0},
        {ORDER_DATE: "12/12/2017 16:45", ORDER_ID: 6, CUSTOMER_ID: 2, SALES: 30.0, BENEFIT: 3.0,
         CATEGORY: "Cleats", MARKET: "Europe", DELIVERY_STATUS: "Late delivery", DAYS_REAL: 7, DAYS_SCHEDULED: 4},
        {ORDER_DATE: "1/9/2018 7:20", ORDER_ID: 7, CUSTOMER_ID: 3, SALES: 90.0, BENEFIT: 9.0,
         CATEGORY: "Camping & Hiking", MARKET: "USCA", PRODUCT_PRICE: 0.0},
        {ORDER_DATE: "1/31/2018 22:56", ORDER_ID: 8, CUSTOMER_ID: 4, SALES: 70.0, BENEFIT: 7.0,
         CATEGORY: "Cardio Equipment", MARKET: "Pacific Asia", PRODUCT_PRICE: 20.0, ITEM_DISCOUNT: 25.0},
    ])


def make_temp_dir(prefix="dataco_"):
    return tempfile.mkdtemp(prefix=prefix)


def cleanup_dir(d):
    if os.path.isdir(d):
        shutil.rmtree(d)

"""
Common Error Constants

Messages shared by services and routers so clients see the same wording
for the same failure.
"""

# Auth errors
ERROR_UNAUTHORIZED = "Unauthorized"
ERROR_INVALID_TOKEN = "Invalid or expired access token"
ERROR_FORBIDDEN = "Insufficient role for this action"
ERROR_ADMIN_REQUIRED = "Admin access required"

# Shop errors
ERROR_SHOP_NOT_FOUND = "Shop not found"
ERROR_SHOP_NOT_SET_UP = "Set up your shop first"
ERROR_SHOP_ALREADY_EXISTS = "You already have a shop"
ERROR_SHOP_LOCATION_REQUIRED = "Please pin your shop location on the map"
ERROR_INVALID_COORDINATES = "Invalid latitude/longitude"

# Product errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"
ERROR_PRODUCT_UNAVAILABLE = "Product is no longer available"
ERROR_OUT_OF_STOCK = "Not enough stock"

# Cart errors
ERROR_CART_EMPTY = "Your cart is empty"
ERROR_CART_ITEM_NOT_FOUND = "Cart item not found"
ERROR_INVALID_QUANTITY = "Quantity must be a positive integer"

# Address errors
ERROR_ADDRESS_NOT_FOUND = "Address not found"
ERROR_ADDRESS_REQUIRED = "No address found. Please add one."

# Checkout errors
ERROR_INVALID_PAYMENT_METHOD = "Unsupported payment method"
ERROR_INVALID_UPI_ID = "Enter a valid UPI ID (yourname@upi)"
ERROR_PLACE_ORDER_FAILED = "Failed to place order"

# Order errors
ERROR_ORDER_NOT_FOUND = "Order not found"
ERROR_ORDER_ACCESS_DENIED = "Order does not belong to you"
ERROR_ORDER_INVALID_STATUS = "Invalid order status"
ERROR_ORDER_STATUS_UPDATE_FAILED = "Failed to update status"

# Postgres error code for unique constraint violations
PG_UNIQUE_VIOLATION = "23505"

# Services Module
# The Database facade is imported from zyra.services.database directly:
# it depends on zyra.cart and zyra.orders, which import from this package.

"""Mixed storefront workload scenario.

Combines catalog, shopper and fulfillment journeys with weights that model
storefront traffic. This is the recommended scenario for load baselines.
"""

from locust import HttpUser, between

from loadtests.scenarios.catalog import BulkUploadJourney, CatalogBuilderJourney
from loadtests.scenarios.shopping import BrowseAndCheckoutJourney, CartChurnJourney, FulfillmentJourney


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload.

    Shoppers (75%):
    - Browse and checkout: the main conversion path
    - Cart churn: add/remove/clear, most carts are never ordered

    Staff (25%):
    - Fulfillment: employees walking pending orders to shipped
    - Catalog building: admins adding products
    - Bulk upload: infrequent CSV imports
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        BrowseAndCheckoutJourney: 9,
        CartChurnJourney: 6,
        FulfillmentJourney: 3,
        CatalogBuilderJourney: 1,
        BulkUploadJourney: 1,
    }

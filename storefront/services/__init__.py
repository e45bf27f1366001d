# Services: device storage, API client, auth, catalog, checkout

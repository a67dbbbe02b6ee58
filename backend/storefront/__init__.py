"""Custom apparel storefront backend."""

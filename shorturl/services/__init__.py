"""
Business logic for the short URL service.

- slug_generator: random slugs for requests without a custom one
- url_service: create and look up slug -> URL mappings
- redirect_service: resolve slugs for the public redirect path
"""

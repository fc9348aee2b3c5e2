"""Language bundles served to the site renderer."""

"""Statement padding pipeline: parse, classify, count, resolve, fix."""

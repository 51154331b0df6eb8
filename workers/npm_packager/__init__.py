"""
npm_packager — Deno TypeScript source → publishable npm package.

Copies sources, rewrites ``.ts`` import specifiers to ``.js``, generates
tsconfig.json and package.json, runs tsc, and removes the intermediates.
No bundling, no minification, no CommonJS output.
"""

__version__ = "0.1.0"
BUILDER_VERSION = "v1"
PACKAGE_NAME = "npm_packager"

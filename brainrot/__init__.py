"""
A tree-walking interpreter for Brainrot, a small expression-oriented language
with integers, booleans, strings, arrays, hashes and first-class closures.
"""

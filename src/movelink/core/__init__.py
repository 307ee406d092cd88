"""Core linkage machinery: package model, dependency graph, and resolver."""

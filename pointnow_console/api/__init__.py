# pointnow_console/api/__init__.py
# SPDX-License-Identifier: Apache-2.0
"""Typed wrappers for the PointNow backend REST API.

`client.ApiClient` is the transport; every other module here is a thin
path/query builder over it, one module per backend resource.
"""

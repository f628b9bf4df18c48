"""
Eagles Events - quote service

Packages:
    api/    Admin JSON routes and the quotation PDF download
    forms/  Quotation PDF rendering (layout, formatting, streaming)
    core/   Shared configuration, paths, store and request guards
"""

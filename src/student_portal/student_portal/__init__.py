"""Student Portal package.

Feature modules (directory, attendance, courses, students, ...) sit behind a
thin Flask controller layer; services talk to the Airtable record store only
through repository interfaces.
"""

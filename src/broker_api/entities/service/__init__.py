"""Request and row records, one package per stored procedure group."""

# Range of a PostgreSQL ``integer`` column
INT4_MIN = -(2**31)
INT4_MAX = 2**31 - 1

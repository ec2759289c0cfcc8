import sqlalchemy

metadata = sqlalchemy.MetaData()

# sqlite only autoincrements an INTEGER PRIMARY KEY, and only stops reusing ids
# with sqlite_autoincrement on the table
id_type = sqlalchemy.BigInteger().with_variant(sqlalchemy.Integer(), "sqlite")

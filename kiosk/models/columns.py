"""Column types shared by the models."""
from sqlalchemy import BigInteger, Integer

# SQLite only autoincrements INTEGER PRIMARY KEY columns
BigIntPK = BigInteger().with_variant(Integer(), 'sqlite')

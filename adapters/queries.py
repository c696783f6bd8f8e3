"""
GraphQL documents sent to the OneSource API.

Selection sets here define the response shapes decoded in
models/nft_models.py; keep the two in step.
"""

IMAGE_FIELDS = """
    status
    url
    contentType
    width
    height
    thumbnails {
      preset
      status
      url
      width
      height
      contentType
      createdAt
    }
    createdAt
    errorMsg
"""

CONTRACT_FIELDS = """
    id
    type
    name
    symbol
    decimals
"""

GET_TOKEN_QUERY = f"""
query GetTokenWithImage($contract: ID!, $tokenID: ID!) {{
  token(contract: $contract, tokenID: $tokenID) {{
    contract {{{CONTRACT_FIELDS}    }}
    tokenID
    tokenURI
    tokenURIStatus
    image {{{IMAGE_FIELDS}    }}
    createdAt
    createdBlock
  }}
}}
"""

GET_BALANCES_QUERY = f"""
query GetBalances($owner: ID!, $contract: String, $first: Int = 10, $skip: Int = 0) {{
  balances(first: $first, skip: $skip, where: {{ owner: $owner, contract: $contract }}) {{
    count
    remaining
    cursor
    balances {{
      owner
      contractType
      contract {{{CONTRACT_FIELDS}      }}
      token {{
        tokenID
        image {{{IMAGE_FIELDS}        }}
      }}
      value
    }}
  }}
}}
"""

# Cheapest document the API accepts; used to check the credential.
HEALTH_CHECK_QUERY = "query HealthCheck { __typename }"

"""Storefront customer-account calls.

Each function performs one remote call and raises a typed exception carrying
the first Shopify user error. Local session state is handled by
``verseandme.customers.session``.
"""

import logging

from verseandme.shopify.client import raise_for_user_errors, storefront_query

from .exceptions import (
    AccountCreationError,
    InvalidCredentials,
    RecoveryError,
    SessionExpired,
    TokenRenewalError,
)

logger = logging.getLogger(__name__)

LOGIN_MUTATION = """
  mutation customerAccessTokenCreate($input: CustomerAccessTokenCreateInput!) {
    customerAccessTokenCreate(input: $input) {
      customerAccessToken {
        accessToken
        expiresAt
      }
      customerUserErrors {
        code
        field
        message
      }
    }
  }
"""

CUSTOMER_QUERY = """
  query getCustomer($customerAccessToken: String!) {
    customer(customerAccessToken: $customerAccessToken) {
      id
      firstName
      lastName
      email
      phone
      acceptsMarketing
      createdAt
      orders(first: 50, sortKey: PROCESSED_AT, reverse: true) {
        edges {
          node {
            id
            name
            orderNumber
            processedAt
            financialStatus
            fulfillmentStatus
            totalPriceV2 {
              amount
              currencyCode
            }
            subtotalPriceV2 {
              amount
              currencyCode
            }
            totalShippingPriceV2 {
              amount
              currencyCode
            }
            totalTaxV2 {
              amount
              currencyCode
            }
            lineItems(first: 50) {
              edges {
                node {
                  title
                  quantity
                  variant {
                    id
                    title
                    image {
                      url
                      altText
                    }
                    priceV2 {
                      amount
                      currencyCode
                    }
                  }
                }
              }
            }
            shippingAddress {
              firstName
              lastName
              address1
              address2
              city
              province
              country
              zip
            }
            statusUrl
          }
        }
      }
    }
  }
"""

LOGOUT_MUTATION = """
  mutation customerAccessTokenDelete($customerAccessToken: String!) {
    customerAccessTokenDelete(customerAccessToken: $customerAccessToken) {
      deletedAccessToken
      deletedCustomerAccessTokenId
      userErrors {
        field
        message
      }
    }
  }
"""

RENEW_TOKEN_MUTATION = """
  mutation customerAccessTokenRenew($customerAccessToken: String!) {
    customerAccessTokenRenew(customerAccessToken: $customerAccessToken) {
      customerAccessToken {
        accessToken
        expiresAt
      }
      userErrors {
        field
        message
      }
    }
  }
"""

CREATE_CUSTOMER_MUTATION = """
  mutation customerCreate($input: CustomerCreateInput!) {
    customerCreate(input: $input) {
      customer {
        id
        email
        firstName
        lastName
      }
      customerUserErrors {
        code
        field
        message
      }
    }
  }
"""

RECOVER_PASSWORD_MUTATION = """
  mutation customerRecover($email: String!) {
    customerRecover(email: $email) {
      customerUserErrors {
        code
        field
        message
      }
    }
  }
"""


def create_access_token(email: str, password: str) -> dict:
    """Exchange credentials for ``{"accessToken", "expiresAt"}``."""
    data = storefront_query(LOGIN_MUTATION, {"input": {"email": email, "password": password}})
    payload = data["customerAccessTokenCreate"]
    raise_for_user_errors(payload, "customerUserErrors", InvalidCredentials)
    return payload["customerAccessToken"]


def get_customer(access_token: str) -> dict:
    """Fetch the customer and their orders for a token."""
    data = storefront_query(CUSTOMER_QUERY, {"customerAccessToken": access_token})
    if not data.get("customer"):
        raise SessionExpired("Customer not found or token expired")
    return data["customer"]


def delete_access_token(access_token: str) -> None:
    storefront_query(LOGOUT_MUTATION, {"customerAccessToken": access_token})


def renew_access_token(access_token: str) -> dict:
    """Renew a token, returning the new ``{"accessToken", "expiresAt"}``."""
    data = storefront_query(RENEW_TOKEN_MUTATION, {"customerAccessToken": access_token})
    payload = data["customerAccessTokenRenew"]
    raise_for_user_errors(payload, "userErrors", TokenRenewalError)
    if not payload.get("customerAccessToken"):
        raise TokenRenewalError("Access token could not be renewed")
    return payload["customerAccessToken"]


def create_customer(email: str, password: str, first_name: str, last_name: str) -> dict:
    data = storefront_query(
        CREATE_CUSTOMER_MUTATION,
        {
            "input": {
                "email": email,
                "password": password,
                "firstName": first_name,
                "lastName": last_name,
                "acceptsMarketing": False,
            }
        },
    )
    payload = data["customerCreate"]
    raise_for_user_errors(payload, "customerUserErrors", AccountCreationError)
    return payload["customer"]


def recover_password(email: str) -> None:
    """Ask Shopify to send a password reset email.

    Whether the address exists is left to Shopify; it does not report it.
    """
    data = storefront_query(RECOVER_PASSWORD_MUTATION, {"email": email})
    raise_for_user_errors(data["customerRecover"], "customerUserErrors", RecoveryError)

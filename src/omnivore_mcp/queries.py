"""GraphQL documents sent to the Omnivore API."""

from typing import Any

USERNAME = "me"
DEFAULT_SINCE = "2021-01-01"

GET_ARTICLE = """
query GetArticle($username: String!, $slug: String!) {
  article(username: $username, slug: $slug) {
    ... on ArticleSuccess {
      article {
        ...ArticleFields
        highlights {
          ...HighlightFields
        }
        labels {
          ...LabelFields
        }
      }
    }
    ... on ArticleError {
      errorCodes
    }
  }
}

fragment ArticleFields on Article {
  savedAt
}

fragment HighlightFields on Highlight {
  id
  quote
  annotation
}

fragment LabelFields on Label {
  name
}
"""

SEARCH = """
query Search($after: String, $first: Int, $query: String, $includeContent: Boolean, $format: String) {
  search(first: $first, after: $after, query: $query, includeContent: $includeContent, format: $format) {
    ... on SearchSuccess {
      edges {
        node {
          title
          slug
          siteName
          originalArticleUrl
          url
          author
          updatedAt
          description
          savedAt
          pageType
          content
          publishedAt
          highlights {
            id
            quote
            annotation
            patch
            updatedAt
            labels {
              name
            }
            type
          }
          labels {
            name
          }
        }
      }
      pageInfo {
        hasNextPage
      }
    }
    ... on SearchError {
      errorCodes
    }
  }
}
"""

UPDATES_SINCE = """
query UpdatesSince($after: String, $first: Int, $since: Date!) {
  updatesSince(first: $first, after: $after, since: $since) {
    ... on UpdatesSinceSuccess {
      edges {
        updateReason
        node {
          slug
        }
      }
      pageInfo {
        hasNextPage
      }
    }
    ... on UpdatesSinceError {
      errorCodes
    }
  }
}
"""


def build_request(document: str, variables: dict[str, Any]) -> dict[str, Any]:
    """Build the JSON body for a GraphQL POST.

    The body is serialized by the HTTP client, so slugs and queries need
    no manual escaping.
    """
    return {"query": document, "variables": variables}


def build_search_query(updated_at: str = "", query: str = "") -> str:
    """Build the Omnivore search string for a sync.

    >>> build_search_query("2023-01-05", "in:inbox")
    'updated:2023-01-05 sort:saved-asc in:inbox'
    """
    updated = f"updated:{updated_at}" if updated_at else ""
    return f"{updated} sort:saved-asc {query}"

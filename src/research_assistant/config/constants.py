"""Fixed word lists and literals shared by the annotators and extractor."""

STOPWORDS = frozenset(
    {
        "a", "about", "after", "all", "also", "am", "an", "and", "any", "are",
        "as", "at", "be", "been", "before", "being", "but", "by", "can", "could",
        "did", "do", "does", "for", "from", "had", "has", "have", "he", "her",
        "here", "him", "his", "how", "i", "if", "in", "into", "is", "it", "its",
        "just", "me", "more", "most", "my", "no", "not", "of", "on", "or", "our",
        "out", "over", "she", "should", "so", "some", "such", "than", "that",
        "the", "their", "them", "then", "there", "these", "they", "this",
        "those", "to", "too", "up", "us", "very", "was", "we", "were", "what",
        "when", "where", "which", "while", "who", "why", "will", "with",
        "would", "you", "your",
    }
)

POSITIVE_WORDS = frozenset(
    {
        "good", "great", "excellent", "amazing", "wonderful", "happy", "love",
        "best", "helpful", "useful", "clear", "robust", "effective",
    }
)

NEGATIVE_WORDS = frozenset(
    {
        "bad", "terrible", "awful", "horrible", "sad", "hate", "worst",
        "broken", "wrong", "useless", "confusing", "poor",
    }
)

TECHNICAL_TERMS = frozenset(
    {
        "algorithm", "api", "async", "cache", "class", "compiler", "database",
        "dataset", "function", "hypothesis", "latency", "methodology", "model",
        "parameter", "protocol", "query", "regression", "schema", "server",
        "statistical", "throughput", "variable", "vector",
    }
)

CITATION_TAG = "[CITATION]"
CITATION_PLACEHOLDER = "Source"
